import cv2, numpy as np

S_MIN = 8
RED = 2  # BGR

def clamp_s(s):
    return max(int(s), S_MIN)

def curve_lut(s):
    """256-entry sigmoid table for the red tone curve; steeper as s drops."""
    s = clamp_s(s)
    x = np.arange(256, dtype=np.float64)/256.0
    y = 1.0/(1.0+np.exp(-((x-0.5)/(s/100.0))))
    return np.clip(np.rint(256.0*y), 0, 255).astype(np.uint8)

def apply_red_lut(img_bgr, lut):
    b,g,r = cv2.split(img_bgr)
    return cv2.merge([b, g, cv2.LUT(r, lut)])

def apply_color_curve(img_bgr, s):
    return apply_red_lut(img_bgr, curve_lut(s))

def halo_radius(w, h, radius_percent):
    max_radius = min(w,h)/2.0
    return max(1, int(round(max_radius*radius_percent/100.0)))

def halo_mask(w, h, radius_percent):
    # 0.5 everywhere, 1.0 inside the circle, softened by an r x r box blur
    r = halo_radius(w, h, radius_percent)
    mask = np.full((h,w,3), 0.5, dtype=np.float32)
    cv2.circle(mask, (w//2, h//2), r, (1.0,1.0,1.0), -1)
    return cv2.blur(mask, (r,r))

def apply_halo_mask(img, mask):
    f = img.astype(np.float32)*mask
    return np.clip(np.rint(f), 0, 255).astype(np.uint8)

def apply_halo(img, radius_percent):
    h,w = img.shape[:2]
    return apply_halo_mask(img, halo_mask(w, h, radius_percent))
