from astro_interp.app import main

raise SystemExit(main())
