"""HTTP surface for the quiz engine."""
