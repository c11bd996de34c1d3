"""ULSU class schedule: academic week detection and live lesson progress."""
