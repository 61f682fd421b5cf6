from flow_migrate.cli import main

main()
