"""Allow running drivekit as `python -m drivekit`."""

from drivekit.cli import main

if __name__ == "__main__":
    main()
