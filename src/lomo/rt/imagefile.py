import os, cv2
from ..errors import ImageLoadError, LibraryError
from ..utils.logging import logger

def load_image(path):
    """Decode ``path`` as a BGR uint8 image or raise :class:`ImageLoadError`."""
    img = cv2.imread(os.fspath(path), cv2.IMREAD_COLOR)
    if img is None or img.size == 0:
        raise ImageLoadError(f"Unable to open picture {path}")
    logger.info("Loaded %s (%dx%d)", path, img.shape[1], img.shape[0])
    return img

def save_image(path, img):
    try:
        ok = cv2.imwrite(os.fspath(path), img)
    except cv2.error as e:
        raise LibraryError.wrap(e, "save") from e
    if not ok:
        raise LibraryError(f"Unable to write picture {path}", "save")
    logger.info("Saved %s", path)
    return path
