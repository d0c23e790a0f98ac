from .models import SubmoduleEntry
from .parser import load_gitmodules, parse_gitmodules

__all__ = ["SubmoduleEntry", "load_gitmodules", "parse_gitmodules"]
