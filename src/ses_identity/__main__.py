from ses_identity.cli.main import main

raise SystemExit(main())
