from fhevm_hub.cli import main

main()
