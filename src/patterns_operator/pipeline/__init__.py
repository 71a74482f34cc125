"""Steps of the Pattern convergence pipeline."""
