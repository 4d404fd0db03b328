"""
Run with: python -m solargrid
"""
from solargrid.main import main

if __name__ == "__main__":
    main()
