"""
Development Runner
==================
Starts the visualizer straight from a source checkout, without installing
the package: `src/` is put in front of `sys.path` before anything from
`twinparadox` is imported. Installed copies use the `twinparadox` command
or `python -m twinparadox` instead.

Usage:
    $ python run.py [--distance 5.2] [--velocity 0.866] [--log-level debug]
"""
import os
import sys

SRC_DIR: str = os.path.join(os.path.dirname(os.path.abspath(__file__)), 'src')
WINDOWS_APP_ID = 'TwinParadox.Visualizer'


def _set_windows_app_id() -> None:
    # Gives the window its own taskbar icon group instead of python.exe's
    if sys.platform != 'win32':
        return
    import ctypes
    ctypes.windll.shell32.SetCurrentProcessExplicitAppUserModelID(WINDOWS_APP_ID)


if __name__ == "__main__":
    sys.path.insert(0, SRC_DIR)
    _set_windows_app_id()

    from twinparadox.main import main
    main()
