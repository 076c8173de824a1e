# Sparse to dense: blank, then progressively heavier punctuation up to "@"
DEFAULT = " .:-=+*#%@"

# A single filled block: every cell is drawn, only colour varies
SOLID = "█"

# Light, medium and dark shades
BLOCKS = " ░▒▓█"

# Longer ASCII ramp for finer gradients
DETAILED = " .'`^\",:;Il!i><~+_-?][}{1)(|\\/tfjrxnuvczXYUJCLQ0OZmwqpdbkhao*#MW&8%B@$"

RAMPS = {
    "default": DEFAULT,
    "solid": SOLID,
    "blocks": BLOCKS,
    "detailed": DETAILED,
}
