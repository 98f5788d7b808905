"""Builder services: factory, canvas, history, evaluators, renderer, controller."""
