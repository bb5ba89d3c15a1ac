"""Single-player grid snake: engine (model), pygame view and controller."""
