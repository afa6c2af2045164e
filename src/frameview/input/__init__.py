"""Local input adapters (terminal keyboard)."""
