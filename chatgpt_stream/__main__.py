"""Package entry point for ``python -m chatgpt_stream``."""

from chatgpt_stream.cli import main

if __name__ == "__main__":
    main()
