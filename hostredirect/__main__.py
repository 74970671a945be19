from hostredirect.app_shell.cli import main

if __name__ == "__main__":
    main()
