"""Hand-off of computed views to the browser renderer."""
