"""HTTP layer of the Cinemovie API."""
