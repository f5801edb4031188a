from . import image_to_ascii_main

raise SystemExit(image_to_ascii_main())
