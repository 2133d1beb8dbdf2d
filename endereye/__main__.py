"""Entry point: python -m endereye"""

from endereye.main import main

if __name__ == "__main__":
    main()
