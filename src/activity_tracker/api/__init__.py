"""HTTP API for the activity tracker."""
