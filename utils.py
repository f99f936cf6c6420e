# utils.py

FREE_COLOR = "#d3d3d3"
FRAGMENT_COLOR = "#f4a261"


def get_color(block, fragment_threshold):
    """Return a color for a block: grey if free, orange if fragmented, pastel per owner."""
    if not block.allocated:
        return FRAGMENT_COLOR if block.size < fragment_threshold else FREE_COLOR
    # stable pastel per process so a block keeps its color across reruns
    return f"hsl({(block.owner * 47) % 360}, 70%, 75%)"


def block_label(block, fragment_threshold, unit="KB"):
    if block.allocated:
        return f"P{block.owner}: {block.size}{unit}"
    if block.size < fragment_threshold:
        return f"Frag: {block.size}{unit}"
    return f"Free: {block.size}{unit}"
