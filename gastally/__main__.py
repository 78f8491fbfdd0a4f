from gastally.cli import main

raise SystemExit(main())
