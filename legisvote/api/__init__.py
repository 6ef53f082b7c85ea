"""HTTP surface of the chamber voting core."""
