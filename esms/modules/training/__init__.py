"""Training matrix register."""
