from space_dodge.game import main


if __name__ == "__main__":
    main()
