import sys

from .sfgenerate import main

sys.exit(main())
