"""Finance Control expense tracker."""
