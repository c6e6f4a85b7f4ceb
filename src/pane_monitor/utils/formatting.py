"""Display formatting for durations, token counts and costs."""


def format_duration(secs: int) -> str:
    """42 -> "42s", 185 -> "3m5s", 7800 -> "2h10m" """
    secs = max(0, int(secs))
    if secs < 60:
        return f"{secs}s"
    if secs < 3600:
        return f"{secs // 60}m{secs % 60}s"
    return f"{secs // 3600}h{(secs % 3600) // 60}m"


def format_tokens(tokens: int) -> str:
    """500 -> "500", 1500 -> "1.5k", 1_500_000 -> "1.5M" """
    if tokens >= 1_000_000:
        return f"{tokens / 1_000_000:.1f}M"
    if tokens >= 1_000:
        return f"{tokens / 1_000:.1f}k"
    return str(tokens)


def format_cost(cost: float) -> str:
    if cost >= 0.01:
        return f"${cost:.2f}"
    if cost > 0:
        return f"${cost:.3f}"
    return "$0"


def truncate(text: str, max_chars: int, ellipsis: str = "…") -> str:
    """Cut `text` to at most `max_chars` code points.

    Counts Python str characters (Unicode code points), so combining
    sequences and wide glyphs are not treated specially.
    """
    if max_chars <= 0:
        return ""
    if len(text) <= max_chars:
        return text
    if len(ellipsis) >= max_chars:
        return text[:max_chars]
    return text[: max_chars - len(ellipsis)] + ellipsis
