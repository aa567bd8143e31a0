import os, json

DEFAULT_CFG = {
    "window": [900, 700]
}

def config_dir():
    return os.environ.get("LOMO_HOME") or os.path.join(os.path.expanduser("~"), ".lomo")

def config_path():
    return os.path.join(config_dir(), "config.json")

def read_config():
    path = config_path()
    if not os.path.exists(path):
        return DEFAULT_CFG.copy()
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError):
        return DEFAULT_CFG.copy()
    if not isinstance(data, dict):
        return DEFAULT_CFG.copy()
    # fill defaults for any missing keys
    for k, v in DEFAULT_CFG.items():
        data.setdefault(k, v)
    return data

def write_config(cfg: dict):
    os.makedirs(config_dir(), exist_ok=True)
    with open(config_path(), "w", encoding="utf-8") as f:
        json.dump(cfg, f, indent=2)
