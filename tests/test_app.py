import os

import cv2
import numpy as np
import pytest

pytest.importorskip("PySide6", reason="PySide6 is required for window tests", exc_type=ImportError)
pytest.importorskip("PySide6.QtWidgets", reason="Qt widgets not available", exc_type=ImportError)

from PySide6 import QtCore, QtGui
from PySide6.QtWidgets import QApplication

from lomo.errors import LibraryError
from lomo.rt.engine import KeyAction, LomoProcessor, Stage
from lomo.rt.nodes import apply_color_curve, apply_halo
from lomo.ui.app import MainWindow, run_gui
from lomo.utils.params import Params, ParamStore


@pytest.fixture(scope="module")
def qapp() -> QApplication:
    os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
    app = QApplication.instance()
    if app is None:
        app = QApplication([])
    yield app


@pytest.fixture
def processor(gradient_image):
    return LomoProcessor(gradient_image, ParamStore(Params(preset_name="faded")))


@pytest.fixture
def window(qapp, processor, tmp_path, monkeypatch):
    # saves land in the working directory
    monkeypatch.chdir(tmp_path)
    w = MainWindow(processor, {"window": [320, 240]})
    w.show()
    qapp.processEvents()
    yield w
    w.close()
    qapp.processEvents()


def _press(widget, key, text=""):
    event = QtGui.QKeyEvent(QtCore.QEvent.Type.KeyPress, key, QtCore.Qt.KeyboardModifier.NoModifier, text)
    QApplication.sendEvent(widget, event)


def test_window_starts_unfiltered(window, gradient_image):
    assert window.windowTitle() == "Lomography Filter [faded]"
    assert window.s_curve["slider"].value() == 10
    assert window.s_radius["slider"].value() == 100
    assert window.proc.stage is Stage.LOADED
    assert window.preview.pixmap().size() == QtCore.QSize(120, 90)


def test_sliders_drive_the_pipeline(window, gradient_image):
    window.s_curve["slider"].setValue(12)
    assert window.proc.stage is Stage.CURVE_APPLIED
    window.s_radius["slider"].setValue(50)
    assert window.proc.stage is Stage.VIGNETTE_APPLIED
    expected = apply_halo(apply_color_curve(gradient_image, 12), 50)
    assert np.array_equal(window.proc.current(), expected)
    assert window.proc.params_store.snapshot().radius == 50


def test_s_key_saves_and_closes(window, tmp_path):
    window.s_curve["slider"].setValue(12)
    window.s_radius["slider"].setValue(50)
    _press(window, QtCore.Qt.Key.Key_S, "s")
    assert window.action is KeyAction.SAVE
    assert not window.isVisible()
    assert window.failure is None
    saved = cv2.imread(str(tmp_path / "output.jpg"))
    assert saved is not None
    assert np.abs(saved.astype(int) - window.proc.current().astype(int)).mean() < 4


@pytest.mark.parametrize("key, text, action", [(QtCore.Qt.Key.Key_Q, "q", KeyAction.QUIT), (QtCore.Qt.Key.Key_X, "x", KeyAction.CLOSE)])
def test_other_keys_close_without_saving(window, tmp_path, key, text, action):
    _press(window, key, text)
    assert window.action is action
    assert not window.isVisible()
    assert not (tmp_path / "output.jpg").exists()


def test_modifier_alone_is_ignored(window):
    _press(window, QtCore.Qt.Key.Key_Shift)
    assert window.action is None
    assert window.isVisible()


def test_slider_error_closes_window(window, monkeypatch):
    def broken(s):
        raise cv2.error("OpenCV(4.9.0) lut.cpp:1\n error: (-215) bad lut")

    monkeypatch.setattr(window.proc, "curve_changed", broken)
    window.s_curve["slider"].setValue(15)
    assert isinstance(window.failure, LibraryError)
    assert str(window.failure) == "error: (-215) bad lut"
    assert not window.isVisible()


def test_save_error_is_kept(window, monkeypatch):
    def broken(*args):
        raise LibraryError("Unable to write picture output.jpg", "save")

    monkeypatch.setattr(window.proc, "save", broken)
    _press(window, QtCore.Qt.Key.Key_S, "s")
    assert window.failure.operation == "save"
    assert not window.isVisible()


def _active_window():
    for w in QApplication.topLevelWidgets():
        if isinstance(w, MainWindow) and w.isVisible():
            return w
    return None


@pytest.fixture
def quit_guard(qapp):
    """Stops the event loop if a session never ends."""
    timer = QtCore.QTimer()
    timer.setSingleShot(True)
    timer.timeout.connect(qapp.quit)
    timer.start(5000)
    yield timer
    timer.stop()


def test_run_gui_returns_none_on_quit(qapp, quit_guard, processor, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    QtCore.QTimer.singleShot(0, lambda: _press(_active_window(), QtCore.Qt.Key.Key_Q, "q"))
    assert run_gui(processor, {"window": [320, 240]}) is None


def test_run_gui_hands_back_slot_error(qapp, quit_guard, processor, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)

    def broken(radius):
        raise LibraryError("blur failed", "vignette")

    monkeypatch.setattr(processor, "radius_changed", broken)
    QtCore.QTimer.singleShot(0, lambda: _active_window().s_radius["slider"].setValue(40))
    failure = run_gui(processor, {"window": [320, 240]})
    assert isinstance(failure, LibraryError)
    assert failure.operation == "vignette"
