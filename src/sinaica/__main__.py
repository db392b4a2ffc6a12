import sys

from src.sinaica.cli import main

sys.exit(main())
