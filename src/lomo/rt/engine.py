import enum
from .nodes import apply_color_curve, apply_halo, clamp_s, halo_radius
from .imagefile import save_image
from ..utils.params import Params, ParamStore
from ..utils.logging import logger

OUTPUT_PATH = "output.jpg"

class Stage(enum.Enum):
    LOADED = "loaded"
    CURVE_APPLIED = "curve_applied"
    VIGNETTE_APPLIED = "vignette_applied"

class KeyAction(enum.Enum):
    QUIT = "quit"
    SAVE = "save"
    CLOSE = "close"

class LomoProcessor:
    """Holds the loaded picture and the curve -> vignette pipeline.

    The curve always reads the original image. The vignette reads the curved
    image when one exists and the original otherwise. A new curve result
    replaces any vignette shown before it.
    """

    def __init__(self, image, param_store=None):
        self.original = image
        self.params_store = param_store or ParamStore(Params())
        self._curved = None
        self._vignetted = None
        self.stage = Stage.LOADED

    def curve_changed(self, s):
        self.params_store.update(s=s)
        logger.debug("Color curve s=%d (effective %d)", s, clamp_s(s))
        self._curved = apply_color_curve(self.original, s)
        self._vignetted = None
        self.stage = Stage.CURVE_APPLIED
        return self._curved

    def radius_changed(self, radius):
        self.params_store.update(radius=radius)
        src = self.original if self._curved is None else self._curved
        h,w = src.shape[:2]
        logger.debug("Vignette radius=%d%% (%dpx) on %s input", radius,
                     halo_radius(w, h, radius), "curved" if self._curved is not None else "original")
        self._vignetted = apply_halo(src, radius)
        self.stage = Stage.VIGNETTE_APPLIED
        return self._vignetted

    def current(self):
        if self._vignetted is not None:
            return self._vignetted
        if self._curved is not None:
            return self._curved
        return self.original

    def save(self, path=OUTPUT_PATH):
        return save_image(path, self.current())

    @staticmethod
    def handle_key(key):
        # single-shot session: every key ends it, only q and s are special
        if key == "q":
            return KeyAction.QUIT
        if key == "s":
            return KeyAction.SAVE
        return KeyAction.CLOSE
