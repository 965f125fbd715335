PALETTE = ("#ebedf0", "#9be9a8", "#40c463", "#30a14e", "#216e39")
MAX_LEVEL = len(PALETTE) - 1


def level_thresholds(max_count: int) -> tuple[int, int, int, int]:
    """Upper bounds of levels 0..3, as quarters of the observed maximum.

    The scale is relative: the same count can land on different levels in
    two renderings whose maxima differ.
    """

    return (
        0,
        max(1, max_count // 4),
        max(1, max_count // 2),
        max(1, max_count * 3 // 4),
    )


def contribution_level(count: int, max_count: int) -> int:
    """Map daily contribution count to a heatmap level in range 0..4."""

    for level, threshold in enumerate(level_thresholds(max_count)):
        if count <= threshold:
            return level
    return MAX_LEVEL
