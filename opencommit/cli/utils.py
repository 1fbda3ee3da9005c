"""CLI Utility Functions"""

import subprocess
import sys


def copy_to_clipboard(text: str) -> tuple[bool, str]:
    """Copy text to clipboard. Returns (success, failure_reason)."""
    data = text.encode('utf-8')
    try:
        if sys.platform == 'win32':
            subprocess.run(['clip'], input=data, check=True)
        elif sys.platform == 'darwin':
            subprocess.run(['pbcopy'], input=data, check=True)
        else:
            try:
                subprocess.run(['xclip', '-selection', 'clipboard'], input=data, check=True)
            except FileNotFoundError:
                subprocess.run(['xsel', '--clipboard', '--input'], input=data, check=True)
        return True, ""
    except FileNotFoundError:
        if sys.platform == 'linux':
            return False, "Install xclip or xsel: sudo apt install xclip"
        return False, "No clipboard tool found"
    except (subprocess.CalledProcessError, OSError) as e:
        return False, f"Clipboard command failed: {e}"
