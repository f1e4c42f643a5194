import os

from config import CONFIG


def ensure_plot_dir(directory=None):
    """Create the plots directory if it doesn't exist."""
    path = directory or CONFIG.play.plots_dir
    if not os.path.exists(path):
        os.makedirs(path, exist_ok=True)
    return path


def get_plot_path(plot_name="move_values", directory=None):
    """Get standardized path for plot files."""
    directory = ensure_plot_dir(directory)
    return os.path.join(directory, f"{plot_name}.png")


def parse_move(text):
    """Read a move typed as "row col" or a cell number 1-9."""
    parts = text.replace(',', ' ').split()
    if len(parts) == 1:
        index = int(parts[0]) - 1
        if not 0 <= index < 9:
            raise ValueError(f"Cell number must be 1-9, got {parts[0]}")
        return divmod(index, 3)
    if len(parts) == 2:
        return int(parts[0]), int(parts[1])
    raise ValueError(f"Could not read a move from {text!r}")
