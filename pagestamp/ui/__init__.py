"""Optional Tk placement window."""
