"""Allow `python -m dicom_dict_gen`."""

import sys

from dicom_dict_gen.cli import main

sys.exit(main())
