import enum


class PrintableEnum(enum.Enum):
    def __str__(self) -> str:
        return self.name

    __repr__ = __str__


def render_excerpt(text: str, char_idx: int, width: int = 10) -> tuple[str, str]:
    """Returns a window of ``text`` around ``char_idx`` and a caret line pointing at it"""
    start_idx = max(0, char_idx - width)
    ellipsis_pre = start_idx > 0
    end_idx = min(len(text), char_idx + width)
    ellipsis_post = end_idx < len(text)
    excerpt = ("..." if ellipsis_pre else "") + text[start_idx:end_idx] + ("..." if ellipsis_post else "")
    caret = " " * (char_idx - start_idx + (3 if ellipsis_pre else 0)) + "^"
    return excerpt, caret
