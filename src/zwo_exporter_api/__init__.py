"""Workout fragment classification and Zwift .zwo export."""
