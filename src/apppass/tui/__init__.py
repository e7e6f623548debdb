"""Full-screen Textual interface for AppPass."""
