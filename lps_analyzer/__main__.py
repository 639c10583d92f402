from lps_analyzer.cli import main

raise SystemExit(main())
