"""Internal implementation of the metadata index."""
