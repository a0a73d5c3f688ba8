import sys

from .generate_site import main

sys.exit(main())
