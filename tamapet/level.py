def level_for(experience: int, xp_per_level: int) -> int:
    """Level reached with `experience` points: one level per full `xp_per_level`."""
    if xp_per_level <= 0:
        raise ValueError("xp_per_level must be positive")
    if experience < 0:
        raise ValueError("experience must not be negative")
    return experience // xp_per_level
