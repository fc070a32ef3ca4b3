"""Allow ``python -m dynamic_xml_builder``."""

import sys

from dynamic_xml_builder.cli import main

sys.exit(main())
