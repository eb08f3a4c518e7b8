from nitfviz.cli import main

raise SystemExit(main())
