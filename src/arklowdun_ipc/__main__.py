from arklowdun_ipc.cli import main

raise SystemExit(main())
