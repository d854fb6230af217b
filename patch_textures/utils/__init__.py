"""Small raster helpers shared by the compositor, the loaders and tests."""
