import sys

from github_app_token.cli import main

sys.exit(main())
