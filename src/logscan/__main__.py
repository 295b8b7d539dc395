from logscan.cli import main

raise SystemExit(main())
