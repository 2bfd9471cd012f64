"""Plain domain records shared by both storage backends."""
