import cv2, numpy as np, yaml, PySide6
print("OpenCV:", cv2.__version__)
print("NumPy:", np.__version__)
print("PyYAML:", yaml.__version__)
print("PySide6:", PySide6.__version__)
