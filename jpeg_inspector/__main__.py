"""Package entry point for ``python -m jpeg_inspector``.

Delegates straight to the CLI's main().
"""

from jpeg_inspector.cli import main

if __name__ == "__main__":
    main()
