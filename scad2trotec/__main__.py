"""Allow ``python -m scad2trotec``."""

from scad2trotec.cli import main

if __name__ == "__main__":
    main()
