"""Taskly - Eisenhower-matrix task prioritization."""
