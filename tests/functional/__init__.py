"""Black-box tests of the department commands."""
