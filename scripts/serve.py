#!/usr/bin/env python3
from shopmerge.api.server import main

if __name__ == "__main__":
    main()
