"""gridkit CLI — drive a grid engine from the terminal."""
