"""Unit tests for the arm_trajectory package."""
