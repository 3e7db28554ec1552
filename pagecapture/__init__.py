"""pagecapture: capture-compare visual regression recipe."""
