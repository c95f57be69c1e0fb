from assetprune.cli import main

raise SystemExit(main())
