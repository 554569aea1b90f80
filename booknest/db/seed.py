from pymongo.database import Database

PEXELS_1 = "https://images.pexels.com/photos/159866/books-book-pages-read-literature-159866.jpeg?auto=compress&cs=tinysrgb&w=300&h=400&fit=crop"
PEXELS_2 = "https://images.pexels.com/photos/1029141/pexels-photo-1029141.jpeg?auto=compress&cs=tinysrgb&w=300&h=400&fit=crop"

SAMPLE_BOOKS = [
    {"title": "The Great Gatsby", "author": "F. Scott Fitzgerald", "genre": "Classic Literature", "price": 12.99,
     "description": "A classic American novel set in the summer of 1922.", "image": PEXELS_1,
     "rating": 4.2, "reviews": 2547, "isbn": "978-0-7432-7356-5", "published_year": 1925, "pages": 180,
     "publisher": "Scribner", "featured": True},
    {"title": "To Kill a Mockingbird", "author": "Harper Lee", "genre": "Classic Literature", "price": 14.99,
     "description": "A tale of racial injustice and childhood innocence in the American South.", "image": PEXELS_2,
     "rating": 4.3, "reviews": 3891, "isbn": "978-0-06-112008-4", "published_year": 1960, "pages": 376,
     "publisher": "Harper Perennial", "featured": True},
    {"title": "1984", "author": "George Orwell", "genre": "Dystopian Fiction", "price": 13.99,
     "description": "A dystopian novel about totalitarianism and surveillance.", "image": PEXELS_2,
     "rating": 4.4, "reviews": 4567, "isbn": "978-0-452-28423-4", "published_year": 1949, "pages": 328,
     "publisher": "Signet Classics", "featured": True},
    {"title": "Pride and Prejudice", "author": "Jane Austen", "genre": "Romance", "price": 11.99,
     "description": "Follows the character development of Elizabeth Bennet.", "image": PEXELS_2,
     "rating": 4.3, "reviews": 2876, "isbn": "978-0-14-143951-8", "published_year": 1813, "pages": 432,
     "publisher": "Penguin Classics"},
    {"title": "The Hobbit", "author": "J.R.R. Tolkien", "genre": "Fantasy", "price": 14.99,
     "description": "Bilbo Baggins and his unexpected journey.", "image": PEXELS_1,
     "rating": 4.3, "reviews": 4123, "isbn": "978-0-547-92822-7", "published_year": 1937, "pages": 366,
     "publisher": "Houghton Mifflin"},
    {"title": "Dune", "author": "Frank Herbert", "genre": "Science Fiction", "price": 16.99,
     "description": "A science fiction masterpiece set on the desert planet Arrakis.", "image": PEXELS_2,
     "rating": 4.2, "reviews": 3456, "isbn": "978-0-441-17271-9", "published_year": 1965, "pages": 688,
     "publisher": "Ace"},
    {"title": "The Alchemist", "author": "Paulo Coelho", "genre": "Philosophical Fiction", "price": 13.99,
     "description": "A novel about following your dreams.", "image": PEXELS_1,
     "rating": 3.9, "reviews": 2876, "isbn": "978-0-06-231500-7", "published_year": 1988, "pages": 163,
     "publisher": "HarperOne", "featured": True},
    {"title": "Educated", "author": "Tara Westover", "genre": "Memoir", "price": 16.99,
     "description": "A memoir about education, family and self-invention.", "image": PEXELS_1,
     "rating": 4.6, "reviews": 3987, "isbn": "978-0-399-59050-4", "published_year": 2018, "pages": 334,
     "publisher": "Random House", "featured": True},
]


def seed_books(db: Database) -> int:
    """Insert the sample catalog into an empty books collection."""
    if db["books"].count_documents({}) > 0:
        return 0
    docs = [{"language": "English", "in_stock": True, "featured": False, **b} for b in SAMPLE_BOOKS]
    res = db["books"].insert_many(docs)
    return len(res.inserted_ids)
