"""
Main entry point for the zte_onu package.

Allows running the client as: python -m zte_onu
"""

from zte_onu.cli import main

if __name__ == "__main__":
    main()
