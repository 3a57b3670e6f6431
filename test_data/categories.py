WOMEN = 'Women'
MEN = 'Men'
KIDS = 'Kids'

CATEGORIES = (WOMEN, MEN, KIDS)

CATEGORY_PRODUCTS = {
    WOMEN: ('Dress', 'Tops', 'Saree'),
    MEN: ('Tshirts', 'Jeans'),
    KIDS: ('Dress', 'Tops & Shirts'),
}
