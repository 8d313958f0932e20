"""Dashboard views. Each module exposes render() for one sidebar page."""
