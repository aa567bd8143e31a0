from dataclasses import dataclass, asdict, replace

S_RANGE = (0, 20)
RADIUS_RANGE = (0, 100)

@dataclass
class Params:
    # tone curve, slider units
    s: int = 10
    # vignette, percent of the limiting half-dimension
    radius: int = 100
    # preset
    preset_name: str = "classic"

class ParamStore:
    def __init__(self, p: Params):
        self._p = p
    def snapshot(self) -> Params:
        return replace(self._p)
    def update(self, **kw):
        for k,v in kw.items():
            if hasattr(self._p, k):
                setattr(self._p, k, v)
    def to_dict(self):
        return asdict(self._p)
