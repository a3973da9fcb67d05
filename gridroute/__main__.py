from gridroute.app.viewer import main

main()
