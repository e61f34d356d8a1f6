"""
Restaurant list state.

Responsibilities:
- Load the restaurant dataset once from a data source and keep it cached.
- Serve debounced, case-insensitive name searches from the cache.
- Keep the displayed list sorted by opening status.
- Toggle favourites on both the displayed list and the cache.
- Publish loading, error and reload events for the UI layer.
"""
