from .sanitizer import HeaderSanitizer
from .strlst import StrLst

__all__ = ['HeaderSanitizer', 'StrLst']
