"""AquaFlow: hydration and voiding tracker."""

__version__ = "0.1.0"
