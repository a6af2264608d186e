from __future__ import annotations

from catalogsync.ui.cli import run

run()
