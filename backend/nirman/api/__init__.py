"""HTTP surface for the Nirman estimator."""
