from fabcast.cli import main

raise SystemExit(main())
