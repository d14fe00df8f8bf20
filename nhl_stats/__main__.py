from nhl_stats.cli import main

main()
