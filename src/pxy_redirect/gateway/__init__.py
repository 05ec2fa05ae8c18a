"""HTTP-facing collaborators around the path resolver."""
