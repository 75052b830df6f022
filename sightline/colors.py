# Type alias for RGB colors
Color = tuple[int, int, int]

# Basic colors
WHITE: Color = (255, 255, 255)
BLACK: Color = (0, 0, 0)
BLUE: Color = (0, 0, 255)
YELLOW: Color = (255, 255, 0)
GREY: Color = (128, 128, 128)
LIGHT_GREY: Color = (200, 200, 200)

# Map colors
LIGHT_WALL: Color = (80, 120, 255)
LIGHT_GROUND: Color = (200, 180, 50)
UNSEEN: Color = (0, 0, 100)

# Entity colors
OBSERVER_COLOR: Color = WHITE

# UI colors
STATUS_TEXT: Color = LIGHT_GREY
