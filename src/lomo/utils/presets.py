import os, glob, yaml
from .config import config_dir
from .params import Params, S_RANGE, RADIUS_RANGE

PRESETS_DIR = os.path.join(os.path.dirname(os.path.dirname(__file__)), "presets")

def user_presets_dir():
    return os.path.join(config_dir(), "presets")

def list_presets():
    files = []
    files += sorted(glob.glob(os.path.join(PRESETS_DIR, "*.yaml")))
    files += sorted(glob.glob(os.path.join(user_presets_dir(), "*.yaml")))
    return files

def _read_preset(path):
    with open(path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f)

def preset_names():
    names = []
    for p in list_presets():
        try:
            d = _read_preset(p)
        except (OSError, yaml.YAMLError):
            continue
        if isinstance(d, dict) and "name" in d:
            names.append(d["name"])
    return sorted(set(names))

def load_preset_by_name(name: str) -> dict | None:
    # later files win, so a user preset shadows a bundled one of the same name
    found = None
    for p in list_presets():
        try:
            data = _read_preset(p)
        except (OSError, yaml.YAMLError):
            continue
        if isinstance(data, dict) and data.get("name") == name:
            found = data
    return found

def _section(preset, key):
    sec = preset.get(key) or {}
    if not isinstance(sec, dict):
        raise ValueError(f"'{key}' must be a mapping, got {sec!r}")
    return sec

def _clamp(v, lo_hi, key):
    try:
        v = int(v)
    except (TypeError, ValueError, OverflowError):
        raise ValueError(f"'{key}' must be an integer, got {v!r}") from None
    lo, hi = lo_hi
    return min(max(v, lo), hi)

def apply_preset_to_params(preset: dict, params: Params):
    if not preset: return params
    # ValueError on a malformed preset; params is left untouched
    c = _section(preset, "curve")
    v = _section(preset, "vignette")
    s = _clamp(c.get("s", params.s), S_RANGE, "s")
    radius = _clamp(v.get("radius", params.radius), RADIUS_RANGE, "radius")
    params.s, params.radius = s, radius
    params.preset_name = preset.get("name", params.preset_name)
    return params
