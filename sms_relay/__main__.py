import sys

from sms_relay.cli import main

sys.exit(main())
