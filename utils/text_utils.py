def single_line(text: str) -> str:
    """Схлопывает переводы строк и повторные пробелы"""
    return " ".join(text.split())

def truncate(text: str, max_len: int = 64, suffix: str = "…") -> str:
    text = single_line(text)
    if len(text) <= max_len:
        return text
    return text[:max_len - len(suffix)].rstrip() + suffix
