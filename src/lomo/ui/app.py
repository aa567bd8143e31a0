import sys, cv2
from PySide6 import QtWidgets, QtGui, QtCore
from ..errors import LomoError, LibraryError
from ..rt.engine import KeyAction
from ..utils.config import write_config
from ..utils.params import S_RANGE, RADIUS_RANGE
from ..utils.logging import logger

WINDOW_TITLE = "Lomography Filter"

class ImageWidget(QtWidgets.QLabel):
    def set_frame(self, bgr):
        rgb = cv2.cvtColor(bgr, cv2.COLOR_BGR2RGB)
        h,w,ch = rgb.shape
        qimg = QtGui.QImage(rgb.data, w, h, ch*w, QtGui.QImage.Format.Format_RGB888)
        # QImage does not own rgb.data
        self.setPixmap(QtGui.QPixmap.fromImage(qimg.copy()))

class MainWindow(QtWidgets.QWidget):
    def __init__(self, processor, cfg):
        super().__init__()
        self.proc = processor
        self.cfg = cfg
        self.failure = None
        self.action = None
        p = self.proc.params_store.snapshot()
        self.setWindowTitle(f"{WINDOW_TITLE} [{p.preset_name}]")

        self.preview = ImageWidget()
        self.preview.setAlignment(QtCore.Qt.AlignmentFlag.AlignCenter)

        # Sliders; initial values are set before wiring so nothing recomputes at startup
        self.s_curve = self._slider(*S_RANGE, p.s, "s")
        self.s_radius = self._slider(*RADIUS_RANGE, p.radius, "radius")
        self.s_curve["slider"].valueChanged.connect(self.on_curve)
        self.s_radius["slider"].valueChanged.connect(self.on_radius)

        form = QtWidgets.QFormLayout()
        form.addRow(self.s_curve["label"], self.s_curve["slider"])
        form.addRow(self.s_radius["label"], self.s_radius["slider"])

        layout = QtWidgets.QVBoxLayout(self)
        layout.addWidget(self.preview, stretch=1)
        layout.addLayout(form)

        self.preview.set_frame(self.proc.current())
        self.resize(*cfg.get("window", [900, 700]))
        self.setFocusPolicy(QtCore.Qt.FocusPolicy.StrongFocus)

    # ---------- helpers ----------
    def _slider(self, lo, hi, val, text):
        s = QtWidgets.QSlider(QtCore.Qt.Orientation.Horizontal)
        s.setRange(lo, hi); s.setValue(val)
        # keys go to the window, not the slider
        s.setFocusPolicy(QtCore.Qt.FocusPolicy.NoFocus)
        return {"slider": s, "label": QtWidgets.QLabel(text)}

    def _run(self, step, *args):
        try:
            return step(*args)
        except LomoError as e:
            self.failure = e
        except cv2.error as e:
            self.failure = LibraryError.wrap(e)
        self.close()
        return None

    # ---------- slider handlers ----------
    def on_curve(self, v):
        img = self._run(self.proc.curve_changed, v)
        if img is not None: self.preview.set_frame(img)

    def on_radius(self, v):
        img = self._run(self.proc.radius_changed, v)
        if img is not None: self.preview.set_frame(img)

    # ---------- keys ----------
    def keyPressEvent(self, e):
        text = e.text()
        if not text:
            # bare modifiers are not a keypress for the session
            return super().keyPressEvent(e)
        self.action = self.proc.handle_key(text)
        logger.debug("Key %r -> %s", text, self.action.name)
        if self.action is KeyAction.SAVE:
            self._run(self.proc.save)
        if self.isVisible(): self.close()

    # ---------- persist window + last settings ----------
    def closeEvent(self, e):
        logger.debug("Session closed with %s", self.proc.params_store.to_dict())
        cfg = dict(self.cfg)
        cfg["window"] = [self.width(), self.height()]
        try:
            write_config(cfg)
        except OSError as err:
            logger.warning("Could not write config: %s", err)
        return super().closeEvent(e)

def run_gui(processor, cfg, argv=None):
    """Show the window until a key ends the session.

    Returns the error that ended it, or ``None`` on a normal close.
    """
    app = QtWidgets.QApplication.instance() or QtWidgets.QApplication(argv or sys.argv[:1])
    w = MainWindow(processor, cfg)
    w.show()
    w.activateWindow()
    app.exec()
    return w.failure
