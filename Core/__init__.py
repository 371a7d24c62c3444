"""Problem and search abstractions shared by the planners."""
