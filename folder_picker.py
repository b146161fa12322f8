"""
Interactive folder selection
"""

import os
from typing import Optional

from config import FOLDER_DIALOG_TITLE


def select_folder(title: str = FOLDER_DIALOG_TITLE, initial_dir: Optional[str] = None) -> Optional[str]:
    """
    Opens a GUI dialog for the user to select a folder.

    Returns:
        The absolute path of the selected folder, or None if cancelled.
    """
    # tkinter is only needed when the dialog is actually shown
    from tkinter import Tk, filedialog

    root = Tk()
    root.withdraw()  # Hide the main tkinter window
    try:
        folder_selected = filedialog.askdirectory(
            initialdir=initial_dir or os.getcwd(),
            title=title,
        )
    finally:
        root.destroy()
    return folder_selected or None
