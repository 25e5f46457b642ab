# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
import sys

from fragc.fragc import main

sys.exit(main())
