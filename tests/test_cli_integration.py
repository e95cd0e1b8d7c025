import subprocess
import sys


def test_cli_help_runs():
    # run as a module so this works whether or not the console script is installed
    cmd = [sys.executable, "-m", "dateshelf", "--help"]
    res = subprocess.run(cmd, capture_output=True, text=True)
    assert res.returncode == 0
    assert "--dry-run" in res.stdout
