"""Package entry point for ``python -m ytranscript``.

HOW: ``--serve`` starts the panel API (uvicorn); anything else goes to
the CLI's main().
"""

import sys

if __name__ == "__main__":
    if "--serve" in sys.argv:
        from ytranscript.server.app import run_api
        run_api()
    else:
        from ytranscript.cli import main
        main()
