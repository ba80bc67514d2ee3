from .text_utils import normalize_reply

__all__ = ["normalize_reply"]
