from huffpack.cli import main

raise SystemExit(main())
