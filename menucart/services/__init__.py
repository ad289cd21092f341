# Restaurant client services
