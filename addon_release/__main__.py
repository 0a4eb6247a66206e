from addon_release.cli.app import main

main()
