"""Impact assessments and their significance rating."""
