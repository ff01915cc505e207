"""Class and attribute names the editor puts on canvas elements."""

IMAGE_CONTAINER = "bloom-imageContainer"
IMAGE_LOAD_ERROR = "bloom-imageLoadError"
UNMODIFIABLE_IMAGE = "bloom-unmodifiable-image"
BACKGROUND_IMAGE = "bloom-backgroundImage"
VIDEO_CONTAINER = "bloom-videoContainer"
EDITABLE = "bloom-editable"
VISIBLE_EDITABLE = "bloom-visibility-code-on"
LINK_GRID = "bloom-link-grid"
RECTANGLE = "bloom-rectangle"
THEME_BACKGROUND = "bloom-theme-background"
CANVAS_BUTTON = "bloom-canvas-button"
NO_AUTO_HEIGHT = "bloom-noAutoHeight"
GIF = "bloom-gif"
PAGE = "bloom-page"

DRAG_ITEM_WRONG = "drag-item-wrong"
DRAG_ITEM_CORRECT = "drag-item-correct"
DRAG_ITEM_ORDER_SENTENCE = "drag-item-order-sentence"

ATTR_ACTIVITY = "data-activity"
ATTR_BUBBLE = "data-bubble"
ATTR_COPYRIGHT = "data-copyright"
ATTR_DRAGGABLE_ID = "data-draggable-id"
ATTR_TARGET_OF = "data-target-of"
ATTR_ICON_TYPE = "data-icon-type"
ATTR_SOUND = "data-sound"

NO_SOUND = "none"
