"""Cone detection and steering heuristic calibration."""
from cv.types import ColorBand

# Colour bands (OpenCV 8-bit HSV, hue 0-180), bounds inclusive
BLUE_BAND = ColorBand(name="blue", lower=(100, 120, 40), upper=(140, 255, 255))
YELLOW_BAND = ColorBand(name="yellow", lower=(20, 100, 100), upper=(30, 255, 255))

# Morphological opening
OPENING_KERNEL_SIZE = (5, 5)

# Boxes with area <= this are rejected as noise
MIN_BOX_AREA_PX = 80

# Steering heuristic (fitted offline against recorded runs)
NARROW_YAW_MIN = -8.0  # inclusive
NARROW_YAW_MAX = 8.0  # exclusive
NARROW_YAW_STEERING = -0.02
HARD_TURN_YAW = -55.0
HARD_TURN_STEERING = -0.3
STEERING_SLOPE = 0.0641
STEERING_INTERCEPT = 0.0387

# Overlay
BOX_COLOR = (0, 255, 0)
BOX_THICKNESS = 2
HEADER_ORIGIN = (10, 35)
HEADER_FONT_SCALE = 0.5
HEADER_COLOR = (255, 255, 255)
HEADER_THICKNESS = 2
HEADER_TAG = "Group5"
