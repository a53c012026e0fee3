"""Front-desk scanner: camera loop that posts member codes to the check-in API."""
