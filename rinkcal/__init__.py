"""Rink schedule loading: team lookup, categories, slot merging and range caching."""
