"""Shell command sets, each added to a shell with its register(shell) function."""