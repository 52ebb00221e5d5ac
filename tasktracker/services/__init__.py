"""Services Layer — orchestrates core rules around store IO (imperative shell)."""
