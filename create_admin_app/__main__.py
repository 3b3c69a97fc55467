from create_admin_app.pipeline import main

main()
