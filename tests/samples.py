ADD_A = "def add(a, b):\n    return a + b"
ADD_B = "def add(x, y):\n    return x + y"

FIVE_LINES = (
    "The quick brown fox jumps over the lazy dog\n"
    "Pack my box with five dozen liquor jugs\n"
    "How vexingly quick daft zebras jump\n"
    "Sphinx of black quartz judge my vow\n"
    "Bright vixens jump while dozy fowl quack"
)

UNRELATED_A = "hello world"
UNRELATED_B = "completely unrelated text sample"
