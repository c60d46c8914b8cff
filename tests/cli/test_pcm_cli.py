import subprocess
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[2]


def test_module_entry_point_formats_file(sample_file: Path) -> None:
    cmd = [sys.executable, "-m", "pcm.cli", "fmt", str(sample_file)]
    proc = subprocess.run(cmd, check=True, capture_output=True, text=True, cwd=ROOT)
    assert "ref terrain material grass" in proc.stdout


def test_script_wrapper_help() -> None:
    cmd = [sys.executable, str(ROOT / "scripts" / "pcm_cli.py"), "--help"]
    proc = subprocess.run(cmd, check=True, capture_output=True, text=True)
    assert "validate" in proc.stdout
