from member_scaffold.cli import main

if __name__ == "__main__":
    main()
